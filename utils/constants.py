APP_NAME = "Finance"
DB_FILE = "finance.db"

DATE_FORMAT = "%Y-%m-%d"

UNCATEGORIZED_LABEL = "Uncategorized"
UNCATEGORIZED_COLOR = "#8E8E93"
DEFAULT_CATEGORY_COLOR = "#999999"

# Slices at or below this share of the total are only shown in the legend
LABEL_SHARE_THRESHOLD = 0.08

DEFAULT_CATEGORIES = [
    {"name": "Food",      "color_hex": "#FF9500"},
    {"name": "Rent",      "color_hex": "#FF3B30"},
    {"name": "Transport", "color_hex": "#34C759"},
    {"name": "Salary",    "color_hex": "#0A84FF"},
]

DEFAULT_SETTINGS = [
    ("currency_symbol", "$"),
]
