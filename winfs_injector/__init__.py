"""Inject the Windows root file system release into a Windows runtime tile."""

__version__ = "0.1.0"