"""
comparemeans: statistical comparison of means behind a task router.

One-sample, independent-samples and paired-samples t-tests, and one-way
ANOVA with Levene variants, Tukey HSD and homogeneous subsets (Tukey,
Duncan), computed from raw data columns with SPSS-style missing values.

Submodules:
    core: Data model, validity filter, errors, distribution wrappers
    descriptive: Shared descriptive aggregates
    ttest: t-test calculators
    anova: One-way ANOVA calculator
    router: Request/response task router
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from comparemeans import anova
from comparemeans import ttest
from comparemeans.core.log import configure_logging
from comparemeans.router import TaskRouter, default_registry, handle_message

__all__ = [
    "__version__",
    "anova",
    "ttest",
    "TaskRouter",
    "default_registry",
    "handle_message",
    "configure_logging",
]
