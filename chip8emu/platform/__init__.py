"""pygame window, audio and keyboard input."""
