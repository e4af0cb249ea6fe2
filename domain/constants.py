"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for selector values, badge colors and
user-facing messages.
"""

# Customer pipeline stages, in selector order
STATUSES = ["New", "Contacted", "Interested", "Closed"]
DEFAULT_STATUS = "New"

INTERACTION_TYPES = ["Note", "Call", "Email", "Meeting"]
DEFAULT_INTERACTION_TYPE = "Note"

MIN_PASSWORD_LENGTH = 6

TABLES = {
    'customers': 'customers',
    'interactions': 'interactions',
    'followups': 'followups',
}

# Due-state labels for follow-up dates
OVERDUE = "Overdue"
DUE_TODAY = "Due Today"
UPCOMING = "Upcoming"

# Interaction type -> badge color; anything else falls back to gray
TYPE_BADGE_COLORS = {
    "Call": "blue",
    "Email": "green",
    "Meeting": "amber",
}
DEFAULT_BADGE_COLOR = "gray"

# User-facing messages
MSG_SIGNUP_SUCCESS = "Registration successful! Please check your email to verify your account."
MSG_NO_USER = "No user found"
MSG_NO_SESSION = "Sign in did not return a session. Please try again."
MSG_DASHBOARD_FAILED = "Something went wrong loading your dashboard. Please try again."
MSG_STATUS_UPDATE_FAILED = "Failed to update status. Please try again."
MSG_ADD_INTERACTION_FAILED = "Could not add interaction. Please try again."
MSG_ADD_FOLLOWUP_FAILED = "Could not add follow-up."
MSG_COMPLETE_FOLLOWUP_FAILED = "Could not mark as completed."
MSG_LOAD_INTERACTIONS_FAILED = "Could not load interactions."
MSG_LOAD_FOLLOWUPS_FAILED = "Could not load follow-ups."
MSG_NO_CUSTOMERS = "No customers added yet."
MSG_NO_MATCHES = "No matches found."
MSG_CUSTOMER_NOT_FOUND = "Customer not found"
