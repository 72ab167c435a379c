"""
Nearby POI recommendation service.

Responsibilities:
- Normalize loosely-shaped requests into a canonical query.
- Search nearby POIs through the AMap place-around API.
- Attach a short recommendation reason to each POI, by rule or by LLM.
"""
