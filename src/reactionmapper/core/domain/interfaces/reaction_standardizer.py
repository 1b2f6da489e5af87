"""Interface for reaction preprocessing."""

from abc import ABC, abstractmethod

from ..models.reaction import Reaction


class ReactionStandardizer(ABC):
    """Abstract base class for reaction standardization."""

    @abstractmethod
    def standardize(self, reaction: Reaction) -> Reaction:
        """
        Return a cleaned copy of ``reaction``.

        Raises:
            StandardizationError: If either side cannot be preprocessed
        """
        pass
