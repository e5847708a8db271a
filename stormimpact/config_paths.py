"""
Storm Impact - Centralized Path Configuration
==============================================

Centralized path management for the pipeline. Every step imports its
directories from here so that relative paths stay consistent.

Usage:
    from stormimpact.config_paths import RAW_DATA_DIR, PROCESSED_DATA_DIR, FINAL_DATA_DIR

    df = pd.read_csv(RAW_DATA_DIR / 'StormData.csv.bz2')
    summary.to_csv(FINAL_DATA_DIR / 'storm_impact_summary.csv', index=False)
"""

from pathlib import Path

# ==============================================================================
# PROJECT ROOT DETECTION
# ==============================================================================

_ROOT_INDICATORS = ['pyproject.toml', 'README.md', '.git']


def find_project_root():
    """
    Find project root by looking for key indicators.
    Searches upward from current file location.
    """
    current = Path(__file__).resolve().parent

    for candidate in [current, *current.parents[:3]]:
        for indicator in _ROOT_INDICATORS:
            if (candidate / indicator).exists():
                return candidate

    # Fallback: parent of the stormimpact/ package
    return current.parent

PROJECT_ROOT = find_project_root()

# ==============================================================================
# DIRECTORY PATHS
# ==============================================================================

CONFIG_DIR = PROJECT_ROOT / 'config'

# Data directories
DATA_DIR = PROJECT_ROOT / 'data'
RAW_DATA_DIR = DATA_DIR / 'raw'
PROCESSED_DATA_DIR = DATA_DIR / 'processed'
FINAL_DATA_DIR = DATA_DIR / 'final'

# Results directories
RESULTS_DIR = PROJECT_ROOT / 'results'
TABLES_DIR = RESULTS_DIR / 'tables'

LOGS_DIR = PROJECT_ROOT / 'logs'

# ==============================================================================
# DIRECTORY CREATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist."""
    directories = [
        CONFIG_DIR,
        RAW_DATA_DIR,
        PROCESSED_DATA_DIR,
        FINAL_DATA_DIR,
        TABLES_DIR,
        LOGS_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)

# Auto-create directories on import
ensure_directories()

# ==============================================================================
# VERIFICATION
# ==============================================================================

if __name__ == "__main__":
    """Run this module to verify path configuration."""
    from rich.console import Console
    from rich.table import Table

    console = Console()
    table = Table(title="Storm Impact Path Configuration", show_header=True)
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Path", style="green")
    table.add_column("Exists?", style="yellow")

    paths = {
        'PROJECT_ROOT': PROJECT_ROOT,
        'CONFIG_DIR': CONFIG_DIR,
        'DATA_DIR': DATA_DIR,
        'RAW_DATA_DIR': RAW_DATA_DIR,
        'PROCESSED_DATA_DIR': PROCESSED_DATA_DIR,
        'FINAL_DATA_DIR': FINAL_DATA_DIR,
        'RESULTS_DIR': RESULTS_DIR,
        'TABLES_DIR': TABLES_DIR,
        'LOGS_DIR': LOGS_DIR,
    }

    for name, path in paths.items():
        exists = "✓" if path.exists() else "✗"
        table.add_row(name, str(path), exists)

    console.print(table)
    console.print("\n[bold green]All paths verified![/bold green]")
