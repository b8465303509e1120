"""GitHub Repository Search Bot Application Package.

An inline Telegram bot that looks up GitHub users and repositories and renders
the matches as inline article results that can be posted into any chat.

The application follows a modular architecture with separate concerns for:
- Inline query parsing and result rendering
- GitHub REST API access with caching and rate-limit tracking
- Error classification into short user-facing messages
"""
