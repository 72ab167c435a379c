"""
Enrichment orchestration.

Responsibilities:
- Fan reason generation out over a POI batch with per-item isolation.
- Race the batch against a deadline and fall back to the unenriched list.
- Define the response envelope the request pipeline returns.
"""
