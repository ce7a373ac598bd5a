"""
Clients for the two remote APIs: Twitter status lookup and Gyazo upload.
"""

from .twitter import TwitterClient, parse_status
from .gyazo import GyazoClient

__all__ = [
    'TwitterClient',
    'parse_status',
    'GyazoClient'
]
