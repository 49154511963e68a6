"""pygame viewer and headless runner."""
