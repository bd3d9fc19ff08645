"""
Process-wide plumbing for the catalog service.

- `db`: the asyncpg pool and `StoreError`, the one exception store calls raise
- `settings`: typed readers for environment variables
- `logs`: text or JSON log output, chosen by `LOG_FORMAT`

Nothing here knows about APIs, categories or stats.
"""
