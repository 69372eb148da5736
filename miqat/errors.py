class MiqatError(Exception):
    pass


class InvalidLocation(MiqatError, ValueError):
    def __init__(self, message, latitude=None, longitude=None):
        super().__init__(message)
        self.latitude = latitude
        self.longitude = longitude


class CalculationFailed(MiqatError):
    pass


class ConfigError(MiqatError, ValueError):
    pass
