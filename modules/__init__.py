# Capitol Trades Query Service - Modules Package
"""
Modules for the Capitol Trades query service.

- errors: Exception hierarchy shared by every layer
- models: Trade record dataclasses
- web_client: requests session with browser headers
- link_finder: Anchor extraction from fetched pages
- id_resolver: Name -> issuer/politician id lookup with a TTL cache
- scraper_trades: Trade row parser and paginated collector
- aggregators: Pure summaries over collected trades
- queries: The public query operations
"""
