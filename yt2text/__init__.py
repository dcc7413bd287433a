"""Download YouTube audio with yt-dlp and transcribe it with Lemonfox."""

__version__ = "0.1.0"
