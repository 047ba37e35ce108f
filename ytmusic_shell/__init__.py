"""
ytmusic-shell: YouTube Music from a logged-in browser session

A small client for the private YouTube Music web API. It reuses the cookies of
a browser session that is already logged in to music.youtube.com, signs each
request the way the web client does, and turns the loosely structured JSON
responses into a handful of plain data models.

## Package Layout

**Configuration (`ytmusic_shell/config/`)**
- YAML and environment based settings
- Session cookie inspection and signing-key resolution

**YouTube Music (`ytmusic_shell/ytmusic/`)**
- Signed JSON transport and the home, search and playlist/album operations
- Shape-tolerant response parser and normalized models
- Logged-in service facade used by the CLI
- Direct audio stream resolution through yt-dlp

**Utilities (`ytmusic_shell/utils/`)**
- Colored console and rotating file logging
- Safe navigation over untyped JSON trees
- Input validation

## Quick Start
```bash
pip install -e .

# Point the tool at a cookies.txt export of a logged-in browser
export YTMUSIC_COOKIE_FILE=~/cookies.txt

ytm-shell auth status
ytm-shell home
ytm-shell search "sezen aksu"
ytm-shell playlist MPREb_xxxxxxxxxxx
```
"""

__version__ = "0.1.0"

__author__ = "ytmusic-shell contributors"

__description__ = "Browse and search YouTube Music with a logged-in browser session"

__all__ = [
    "__version__",
    "__author__",
    "__description__"
]
