"""Student notifications derived from officer feedback."""
