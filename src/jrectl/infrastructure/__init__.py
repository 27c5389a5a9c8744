"""Infrastructure layer — JDK filesystem and subprocess access."""
