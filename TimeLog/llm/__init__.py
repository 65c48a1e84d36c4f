"""Gemini calls: transport, ordered model fallback, code summaries and timesheets."""
