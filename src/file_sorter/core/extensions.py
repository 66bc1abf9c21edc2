"""Built-in extension tables for each category."""

from typing import Dict, Tuple

IMAGE_EXTENSIONS = (
    '.jpg',
    '.png',
    '.svg',
    '.jpeg',
    '.gif',
    '.tiff',
    '.tif',
    '.ico',
    '.cur',
    '.bmp',
    '.raw',
    '.jfif',
    '.pjpeg',
    '.pjp',
)

# .m4v appears twice; the first listing wins
VIDEO_EXTENSIONS = (
    '.mp4',
    '.mkv',
    '.webm',
    '.flv',
    '.vob',
    '.ogg',
    '.ogv',
    '.drc',
    '.avi',
    '.mng',
    '.mov',
    '.qt',
    '.wmv',
    '.m4p',
    '.m4v',
    '.mpg',
    '.mpeg',
    '.mp2',
    '.m2v',
    '.m4v',
)

MUSIC_EXTENSIONS = ('.mp3', '.wav', '.mid', '.midi')
DOCUMENTS_EXTENSIONS = ('.docx', '.doc', '.pdf')
PRESENTATIONS_EXTENSIONS = ('.ppt', '.pptx')
TABLES_EXTENSIONS = ('.xls', '.xlsx', '.csv')
TEXT_EXTENSIONS = ('.txt', '.TXT')
ARCHIVE_EXTENSIONS = ('.zip', '.rar', '.7z', '.gz')
EXECUTABLE_EXTENSIONS = ('.exe', '.msi')

# Declared order is the match precedence: the first category whose
# extension list contains a matching suffix wins.
CATEGORY_ORDER: Tuple[str, ...] = (
    'image',
    'video',
    'music',
    'documents',
    'presentations',
    'tables',
    'text',
    'archive',
    'executable',
)

DEFAULT_EXTENSIONS: Dict[str, Tuple[str, ...]] = {
    'image': IMAGE_EXTENSIONS,
    'video': VIDEO_EXTENSIONS,
    'music': MUSIC_EXTENSIONS,
    'documents': DOCUMENTS_EXTENSIONS,
    'presentations': PRESENTATIONS_EXTENSIONS,
    'tables': TABLES_EXTENSIONS,
    'text': TEXT_EXTENSIONS,
    'archive': ARCHIVE_EXTENSIONS,
    'executable': EXECUTABLE_EXTENSIONS,
}

# Environment variable holding each category's destination directory
CATEGORY_ENV_VARS: Dict[str, str] = {
    'image': 'IMAGE_DIR',
    'video': 'VIDEO_DIR',
    'music': 'MUSIC_DIR',
    'documents': 'DOCUMENTS_DIR',
    'presentations': 'PRESENTATIONS_DIR',
    'tables': 'TABLES_DIR',
    'text': 'TEXT_DIR',
    'archive': 'ARCHIVE_DIR',
    'executable': 'EXE_DIR',
}

OTHER_CATEGORY = 'other'
