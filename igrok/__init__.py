"""
igrok: download YouTube audio with yt-dlp and play it with mpv, alongside a
cava visualizer.
"""

__version__ = "1.0.0"
