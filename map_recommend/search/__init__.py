"""
Search gateway.

Responsibilities:
- Turn a canonical Query into an AMap place/around request.
- Widen recall for yoga searches with a union of synonym keywords.
- Map provider records into POIRecord, omitting fields the provider left out.
"""
