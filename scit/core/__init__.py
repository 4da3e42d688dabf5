"""Core — Engine facade, logging, and network selection."""
