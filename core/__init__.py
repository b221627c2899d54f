"""Core (UI-agnostic) ACV dashboard logic.

This package contains:
- dataset registry and JSON loading
- record parsing and quarter x category aggregation
- stacked-bar, doughnut and cross-tab projections (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
