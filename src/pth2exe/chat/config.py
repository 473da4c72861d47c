"""Canned chat texts.

Centralizes every fixed string the session can put in front of the user.
"""

GREETING = "Hello! I'm your MLOps assistant. Ask me anything about this MONAI deployment guide."

EMPTY_RESPONSE_FALLBACK = "I don't have a response for that."

SEND_ERROR_MESSAGE = "Sorry, I encountered an error. Please try again."

MISSING_CREDENTIAL_NOTICE = "API_KEY is not configured. The chat assistant is disabled."

INIT_FAILURE_NOTICE = "Failed to initialize the AI chat service. Check the log panel for details."
