# This file consolidates all hard-coded values for better maintainability

import os

from dotenv import load_dotenv

load_dotenv()

# Deduplication Configuration
DEDUPE_NAME_THRESHOLD = 0.85          # Fuzzy name bar when organizer or deadline corroborates
DEDUPE_NAME_ONLY_THRESHOLD = 0.95     # Fuzzy name bar with no corroboration
WINKLER_PREFIX_CAP = 4                # Maximum shared prefix rewarded by Jaro-Winkler
WINKLER_SCALING = 0.1                 # Jaro-Winkler prefix scaling factor

# Lifecycle Configuration
JUDGING_WINDOW_DAYS = 14              # Implicit judging period when no results date is known
DEFAULT_STATUS = "registration_open"  # Provisional status for newly created records

# Candidate Gating
MIN_CANDIDATE_CONFIDENCE = 0.5        # Candidates below this confidence are skipped
MIN_NAME_LENGTH = 3                   # Minimum hackathon name length
MAX_NAME_LENGTH = 200                 # Maximum hackathon name length

# Identity
SLUG_MAX_LENGTH = 60                  # Maximum length of a slug-derived record id

# Display Configuration
BANNER_WIDTH = 80                     # Width of banners and separators
SECTION_SEPARATOR_WIDTH = 50          # Width of section separators
MAX_DISPLAY_NAME = 45                 # Maximum name length in tables
MAX_DISPLAY_ORGANIZER = 25            # Maximum organizer length in tables

# Database configuration
DATABASE_URL = os.getenv('DATABASE_URL', 'sqlite:///hackathons.db')
MAX_POOL_SIZE = 10
POOL_TIMEOUT = 30
DB_MAX_OVERFLOW = 20            # Maximum database connection overflow
DB_POOL_RECYCLE = 3600          # Pool recycle time in seconds (1 hour)
DB_ID_MAX_LENGTH = 100          # Maximum record id column length
DB_NAME_MAX_LENGTH = 500        # Maximum hackathon name column length
DB_URL_MAX_LENGTH = 1000        # Maximum hackathon URL column length
DB_SOURCE_MAX_LENGTH = 100      # Maximum source column length

# Storage
HACKATHON_STORE_BACKEND = os.getenv('HACKATHON_STORE_BACKEND', 'json')   # 'json' or 'sql'
HACKATHONS_DATA_DIR = os.getenv('HACKATHONS_DATA_DIR', os.path.join('data', 'hackathons'))

# Logging
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
