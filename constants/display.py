NOT_AVAILABLE = "N/A"
UNKNOWN = "Unknown"
UNKNOWN_BANK = "Unknown Bank"
DASH = "-"
EMPTY = ""
NO_PHONE = "No phone"
NO_DEADLINE = "No deadline"
EXPIRED = "Expired"
DEFAULT_COUNTRY = "KSA"
DEFAULT_ASSIGNEE = "User"
CURRENCY = "SAR"
REQUEST_FAILED = "Request failed"
