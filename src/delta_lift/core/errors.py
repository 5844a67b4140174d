"""Exceptions raised when a scenario falls outside the domain of the tests."""


class DomainError(ValueError):
    """Base class for inputs that make a test statistic undefined."""


class InvalidSampleSizeError(DomainError):
    """Sample size of 1 or less (no unbiased variance, no finite dof)."""


class ZeroBaselineError(DomainError):
    """Control mean of zero; the relative difference divides by it."""


class NegativeVarianceError(DomainError):
    """Negative variance passed to the t-test."""


class InvalidProportionError(DomainError):
    """Binomial variance requested for a mean outside [0, 1]."""


class DegenerateVarianceError(DomainError):
    """Degrees of freedom cannot be computed from the variances given."""
