"""Settings, discovery and logging for the nodecfg tool itself."""
