"""Configuration constants for coedit."""

import os

from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

# Separator git uses in --numstat output for renamed files
RENAME_SEPARATOR = " => "

# Pairs must be more similar than this to be reported (0 <= x < 1)
SIMILARITY_THRESHOLD = float(os.getenv("COEDIT_SIMILARITY_THRESHOLD", "0.6"))

# Number of contributors shown in the ranking
TOP_CONTRIBUTORS = int(os.getenv("COEDIT_TOP_CONTRIBUTORS", "5"))

# Pairs whose combined weight is below this are ignored
MIN_COMBINED_WEIGHT = float(os.getenv("COEDIT_MIN_COMBINED_WEIGHT", "100"))

# How a commit's line changes turn into weight (linear, sqrt, squared)
WEIGHT_FUNCTION = os.getenv("COEDIT_WEIGHT_FUNCTION", "linear")
