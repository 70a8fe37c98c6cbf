"""Report renderers — terminal and JSON."""
