"""Infrastructure layer for portafs: logging and OS-facing filesystem services."""
