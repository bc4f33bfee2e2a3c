# core/formatters.py

# all pure utilities & number helpers
# must never import from models!

# === grade formatters ===


def format_average(average: float, scale: int = 20) -> str:
    return f"{average:.2f}/{scale}"


def format_percentage(percentage: float) -> str:
    return f"{percentage:.1f} %"
