"""Telegram bot message templates and constants.

Contains all user-facing texts: command replies, inline query button prompts
and the error messages produced by the error classifier.
"""

# Bot commands
START_MESSAGE = (
    "GitHub Repository Search Bot\n\n"
    "Bot username: <b>{username}</b>\n\n"
    "Usage in any chat:\n"
    "1. Type @{username} username\n"
    "2. Or @{username} username/reponame\n\n"
    "Examples:\n"
    "• @{username} Microsoft\n"
    "• @{username} microsoft/vscode"
)
TEST_MESSAGE = "Bot is working! Try inline mode: @{username} Microsoft"

STATUS_MESSAGE = (
    "GitHub API Status:\n\n"
    "Remaining requests: {remaining}/{limit}\n"
    "Reset time: {reset_time}\n\n"
    "Usage: {usage}%"
)
STATUS_UNAVAILABLE = "Unable to fetch rate limit status"
STATUS_TIME_FORMAT = "%H:%M:%S UTC"

# Inline query buttons shown instead of results
PROMPT_ENTER_QUERY = "Enter username/repo to search"
NO_REPOSITORIES_FOUND = "No repositories found"

START_PARAM_HELP = "help"
START_PARAM_NOT_FOUND = "not_found"
START_PARAM_ERROR = "error"

# Result rendering
NO_DESCRIPTION = "No description"
OPEN_REPOSITORY_LINK = "Open repository"
UPDATED_DATE_FORMAT = "%Y-%m-%d"

# Error messages
ERROR_TIMEOUT = "GitHub request timeout"
ERROR_RATE_LIMIT = "GitHub API rate limit exceeded. Please try again later."
ERROR_NOT_FOUND = "Repository not found"
ERROR_INVALID_QUERY = "Invalid search query"
ERROR_SEARCH = "GitHub search error"
ERROR_GENERIC = "Error: {message}"
ERROR_UNKNOWN = "Unknown error"
