class LoadError(RuntimeError):
    pass


class SourceNotFound(LoadError):
    pass


class SourceUnavailable(LoadError):
    pass
