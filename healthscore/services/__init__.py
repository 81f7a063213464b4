"""
Services module for the Stock Health Score.
"""

from healthscore.services.cache import get_cache
from healthscore.services.redis_cache import RedisCache
