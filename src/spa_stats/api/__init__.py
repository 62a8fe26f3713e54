"""API components - aiohttp application and response rendering."""

from spa_stats.api.server import PROVIDER_KEY, create_app
from spa_stats.api.render import stats_to_json, stats_to_xml

__all__ = ["PROVIDER_KEY", "create_app", "stats_to_json", "stats_to_xml"]
