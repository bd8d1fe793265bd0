BYTE_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_bytes(bytes_size: int | float) -> str:
    if bytes_size < 0:
        raise ValueError("Bytes size must be non-negative")

    for unit in BYTE_UNITS:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"

        bytes_size /= 1024.0

    return f"{bytes_size:.2f} PB"


def format_time(elapsed_seconds: float) -> str:
    days, remainder = divmod(elapsed_seconds, 86_400)
    hours, remainder = divmod(remainder, 3_600)
    minutes, seconds = divmod(remainder, 60)

    return f"{int(days):02d}d {int(hours):02d}h {int(minutes):02d}m {seconds:05.2f}s"


def format_interval_ms(interval_ms: int) -> str:
    if interval_ms < 1_000:
        return f"{interval_ms}ms"

    return format_time(interval_ms / 1_000)
