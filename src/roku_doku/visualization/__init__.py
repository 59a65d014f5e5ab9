"""Front ends: text rendering, terminal play and the pygame window."""
