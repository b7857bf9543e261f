"""
Configuration constants for the listing catalog.
"""

# --- Sentinels ---
UNKNOWN = 'Unknown'
DIRECTORY = 'Directory'
ALL = 'all'

# --- File Type Definitions ---
DOCUMENT_EXTS = {'pdf', 'txt', 'doc', 'docx'}
VIDEO_EXTS = {'mp4', 'mpg', 'mpeg', 'mov', 'avi'}
ARCHIVE_EXTS = {'zip', 'rar', '7z'}
WEBPAGE_EXTS = {'htm', 'html'}

DEFAULT_TYPE = 'document'
FOLDER_TYPE = 'folder'
FILE_TYPES = {'document', 'video', 'archive', 'webpage', 'folder'}

# Extension to Type Mapping
# Used to quickly classify files without complex if/else chains
EXT_TO_TYPE = {}
for ext in DOCUMENT_EXTS: EXT_TO_TYPE[ext] = 'document'
for ext in VIDEO_EXTS: EXT_TO_TYPE[ext] = 'video'
for ext in ARCHIVE_EXTS: EXT_TO_TYPE[ext] = 'archive'
for ext in WEBPAGE_EXTS: EXT_TO_TYPE[ext] = 'webpage'

# --- Listing Navigation ---
PARENT_DIRECTORY_TEXT = 'Parent Directory'
SORT_CONTROL_MARKER = '?C='
CONTROL_PREFIXES = ('?', '#')

# --- Listing Line Parsing ---
# Apache rows look like: "name.pdf      2021-05-12 14:30  250K"
DATE_PATTERN = r'(\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2})'
SIZE_PATTERN = r'\s+(\d+(?:\.\d+)?[KMG]?|-)\s*$'
DATE_FORMAT = '%Y-%m-%d %H:%M'

SIZE_MULTIPLIERS = {
    'K': 1024,
    'M': 1024 * 1024,
    'G': 1024 * 1024 * 1024,
}

# --- Person Inference ---
# Ordered (pattern, name, case_sensitive). First match wins, so specific
# patterns must stay above the generic surname ones.
PERSON_PATTERNS = [
    (r'^TJ\d+', 'Timothy Jackson', True),
    (r'Jackson', 'Timothy Jackson', False),
    (r'Ewell', 'Philip Ewell', False),
    (r'Walls', 'Levi Walls', False),
    (r'Brand', 'Benjamin Brand', False),
    (r'Graf', 'Benjamin Graf', False),
    (r'Gain', 'Rachel Gain', False),
    (r'Heidlberger', 'Frank Heidlberger', False),
    (r'Rebecca.*Schwinden', 'Rebecca Dowd Geoffroy-Schwinden', False),
    (r'Cowley', 'Jennifer Cowley', False),
    (r'Ishiyama', 'John Ishiyama', False),
    (r'Slottow', 'Stephen Slottow', False),
    (r'Chung', 'Andrew Chung', False),
    (r'Bakulina', 'Ellen Bakulina', False),
    (r'Kohanski', 'Peter Kohanski', False),
    (r'Chaouat', 'Bruno Chaouat', False),
]

# --- Keywords ---
MIN_KEYWORD_LENGTH = 3
DOMAIN_TERMS = [
    ('deposition', ('testimony', 'legal', 'court')),
    ('motion', ('legal', 'court', 'filing')),
    ('exhibit', ('evidence', 'legal', 'court')),
]

# --- Identifiers ---
ID_LENGTH = 16

# --- Query ---
SORT_KEYS = {
    'name': 'display_name',
    'person': 'person',
    'type': 'type',
    'date': 'date',
    'size': 'size_bytes',
}
SORT_ORDERS = ('asc', 'desc')
DEFAULT_SORT = 'name'
DEFAULT_ORDER = 'asc'

# --- Fetching ---
DEFAULT_BASE_URL = 'https://www.rasmusen.org/special/jackson/'

# (name, template). '{url}' receives the percent-encoded listing URL,
# '{raw_url}' the URL as-is.
PROXY_ENDPOINTS = [
    ('allorigins', 'https://api.allorigins.win/raw?url={url}'),
    ('corsproxy', 'https://corsproxy.io/?url={url}'),
    ('direct', '{raw_url}'),
]

CACHE_DURATION_SECONDS = 5 * 60  # 5 minutes
REQUEST_TIMEOUT = 30
ATTEMPTS_PER_ENDPOINT = 1

REQUEST_HEADERS = {
    'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36',
}
