"""Geohazards gateway - earthquake and volcano data from USGS.

Layout:
- core: pure functions (parsing, distance, ranking, risk, queries, formatting)
- shell: I/O (USGS HTTP clients, configuration loading)
- orchestrator: runs each operation by wiring core and shell
- api: FastAPI application
"""

__version__ = "1.0.0"
