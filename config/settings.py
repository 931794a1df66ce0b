"""
Configuration settings for SurveyPulse.

Centralized configuration for the extraction engine and the CLI.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Record layout
UNIT_CODE_PREFIX = os.getenv("SURVEYPULSE_UNIT_PREFIX", "SBRSP")
RECORD_ID_MIN_DIGITS = 5  # "#12345" starts a new record block
MIN_BLOCK_LENGTH = 50  # Shorter blocks are page furniture or fragments

# Section markers
COMMENT_MARKERS = ("Comentário", "Comment")
FEEDBACK_MARKER_PATTERN = r"Feedback\s*\d*:"  # "Feedback:" or "Feedback 1:"

# Comment validity
MIN_COMMENT_LENGTH = 3
IGNORED_PHRASES = (
    "Usuário não deixou",
    "Não houve contato",
    "Cliente não autorizou",
    "Obtive contato",
    "Sem contato",
)
INVALID_COMMENT_SENTINEL = ""  # Alternate consumers use "[Sem Comentário Válido]"
MISSING_COMMENT_PLACEHOLDER = "[Sem Comentário]"

# Hardening caps for pathological inputs
MAX_INPUT_CHARS = 20_000_000
MAX_BLOCKS = 200_000

# Parallel block parsing (1 = sequential)
PARSE_WORKERS = int(os.getenv("SURVEYPULSE_WORKERS", "1"))

# Logging
LOG_LEVEL = os.getenv("SURVEYPULSE_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "surveypulse.log"


# Design Rationale and Trade-offs:
#
# 1. Why module constants instead of a config file?
#    - Report layout changes rarely and ships with the code
#    - ExtractionConfig lets callers override any value per run
#    - Trade-off: Editing defaults needs a code change
#
# 2. Why environment variables for prefix and workers only?
#    - Those are the values that differ between deployments
#    - Markers and phrases are tied to the report language
#    - Trade-off: Other values need a custom ExtractionConfig
#
# 3. Why an empty string as the default invalid-comment sentinel?
#    - Empty comments already mean "nothing to show" downstream
#    - Grouping replaces them with the missing-comment placeholder
#    - Trade-off: Invalid and absent comments look the same in the JSON
#
# 4. Why input and block caps?
#    - A malformed export can be huge or split into millions of fragments
#    - Caps bound memory and time, and are reported as warnings
#    - Trade-off: Oversized reports are parsed partially
