"""VoiceNav -- voice-command navigation for the learning platform."""

__version__ = "0.1.0"
