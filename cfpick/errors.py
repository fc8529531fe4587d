# cfpick/errors.py


class CfpickError(Exception):
    pass


# --- per-source, retried inside fetch_source ---
class FetchError(CfpickError):
    pass


class RenderTimeout(FetchError):
    """Page did not show the expected table within the source's budget."""


class NavigationError(FetchError):
    pass


class SanityError(FetchError):
    def __init__(self, source: str, count: int, minimum: int):
        super().__init__(f"{source} extracted too few IPs: {count} (<{minimum})")
        self.source = source
        self.count = count
        self.minimum = minimum


# --- fatal for the whole run ---
class ThresholdError(CfpickError):
    def __init__(self, total: int, minimum: int):
        super().__init__(f"Too few IPs after merge: {total} (<{minimum}). Abort writing.")
        self.total = total
        self.minimum = minimum


class SourcesFailed(CfpickError):
    def __init__(self, names: list[str]):
        super().__init__(f"All sources failed ({', '.join(names) or 'none configured'}). Abort writing.")
        self.names = names


class ConfigError(CfpickError):
    pass
