"""Line spacing analysis for pen plotter SVG drawings."""
