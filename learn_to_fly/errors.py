"""
Errors raised by the engine. Every failure is a local configuration or
programming error; nothing here is transient or worth retrying.
"""


class LearnToFlyError(Exception):
    """Base for all engine exceptions."""

    pass


class ValidationError(LearnToFlyError):
    """Configuration value outside its allowed range."""

    pass


class ConfigurationError(ValidationError):
    """Network topology that cannot be built."""

    pass


class DimensionMismatch(LearnToFlyError, ValueError):
    """Vector length does not match what a network expects."""

    pass


class EvolutionError(LearnToFlyError):
    """Genetic algorithm failures."""

    pass


class EmptyPopulation(EvolutionError):
    """Selection or evolution invoked on zero individuals."""

    pass


class SelectionError(EvolutionError):
    """No valid weighted pick exists for the given fitness values."""

    pass


class CrossoverError(EvolutionError):
    """Parent chromosomes have different lengths."""

    pass
