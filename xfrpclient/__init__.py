"""Building blocks for a lightweight reverse-proxy client: messages, frames, login, proxies, INI, compression and PBKDF2."""

__version__ = "1.0.1"