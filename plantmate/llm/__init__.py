"""
LLM integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Build prompts from a growing space and the plant catalog.
- Call Groq LLM to score candidate plants and explain each pick.
- Return an empty result when the LLM is unavailable or returns invalid output,
  so the caller can fall back to rule-based scoring.
"""
