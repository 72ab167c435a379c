"""
Recommendation reason generation.

Responsibilities:
- Rule strategy: a deterministic sentence from distance, district, rating and intent.
- LLM strategy: a Groq-written sentence, time-bounded and truncated.
- Fall back from LLM to rules on any failure; never raise to the caller.
"""
