"""
AI flows: prompt templates sent to Gemini with schema-validated JSON replies.
"""
