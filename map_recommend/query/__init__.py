"""
Request normalization.

Responsibilities:
- Pull coordinates out of the many key aliases clients send.
- Canonicalize route type, business keyword, locale and intent.
- Never raise: every bad field collapses to a safe default.
"""
