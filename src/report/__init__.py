"""Report rendering and declarative report specs."""
