"""Deploy Gateway - authenticated HTTP gateway in front of the Vercel API."""

__version__ = "0.1.0"
