"""
Math Formula Hub: grade-aware formula explanations in the terminal.

Components:
- core: session/settings state, query state machine, controller
- services: Gemini-backed explanation and syllabus fetchers
- delivery: Rich rendering of explanation cards and syllabi
- cli: Typer entry point and interactive dashboard
"""

__version__ = "1.0.0"
