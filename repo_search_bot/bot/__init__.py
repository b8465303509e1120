"""Telegram bot implementation package.

Contains the inline-query pipeline (query parsing, orchestration, result
rendering and error classification) together with the command handlers and
message templates shown to users.
"""
