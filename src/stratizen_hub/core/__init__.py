"""Core configuration, security and point rules."""
