# fogmap/config/defaults.py
"""Default configuration values for the fog grid engine."""

from pathlib import Path

# Project path
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / 'logs'

PATHS = {
    'project_root': str(PROJECT_ROOT),
    'logs_dir': str(LOGS_DIR),
}

# Fog grid tiling. 1 km is about 1/111 degree of latitude; the longitude
# step is a single value tuned for the default region's latitude band.
FOG_GRID = {
    'region': 'taiwan',
    'cell_size_lat': 1.0 / 111.0,
    'cell_size_lon': 0.01,
    # Derive the longitude step from cell_size_km at reference_latitude
    # instead of using cell_size_lon as-is
    'longitude_correction': False,
    'cell_size_km': 1.0,
    'reference_latitude': 23.5,
    'identifier_prefix': 'grid',
    'identifier_precision': 6,
}

# Zoom level -> sampling stride. Each entry reads "zoom below N uses stride S";
# zoom levels past the last threshold (or no zoom at all) use default_stride.
LEVEL_OF_DETAIL = {
    'thresholds': [
        [7, 12],
        [8, 10],
        [9, 8],
        [10, 6],
        [11, 4],
        [12, 2],
    ],
    'default_stride': 1,
}

# Named regions in addition to the predefined ones, as
# [min_lon, min_lat, max_lon, max_lat] or {'bounds': [...], 'category': ...}
REGIONS = {
    'custom': {}
}

LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'file': LOGS_DIR / 'fogmap.log',
    'max_file_size': 10 * 1024 * 1024,  # 10MB
    'backup_count': 5,
}
