"""
Emoji Translator Module

Text-to-emoji and emoji-to-text translation over the Gemini and emj.is APIs.
The HTTP router lives in `emoji_translator.router`.
"""
