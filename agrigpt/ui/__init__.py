"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat page with topic selector, suggestions and message history
    - Composer with photo capture, upload and voice dictation
    - Sign-in page for the user's email
    - Localized labels (English, Hindi, Telugu)

Contains minimal business logic. Delegates submissions to ChatSession.
"""
