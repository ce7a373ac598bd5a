"""
tweet_gyazo
-----------
Relay the photos of a tweet to Gyazo, keeping the caption as description.
"""

__version__ = "1.0.0"
