"""Core (UI-agnostic) keyword exposure dashboard logic.

This package contains:
- category configuration and snapshot sources (HTTP / local JSON)
- keyword normalization, summary statistics and the multi-category merge
- view selection and the filter/sort/paginate list view engine
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
