"""
AI Content Wizard package.

Provides:
- A Groq chat-completion client (request builder + async transport)
- The `ai-wizard` command line tool
"""
