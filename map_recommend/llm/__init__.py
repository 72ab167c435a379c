"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Send a system + user message pair and return the first choice's text.
- Convert every provider failure into a GenerationError for the caller.
"""
