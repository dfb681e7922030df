"""Configuration loading for ring buffers: profiles, environment and overrides."""
