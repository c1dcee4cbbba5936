"""
Base classes for use cases in the application layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class BaseRequest(ABC): ...


@dataclass
class BaseResponse(ABC): ...


class BaseUseCase[TRequest: BaseRequest, TResponse: BaseResponse](ABC):
    """
    A single action served by the cache, e.g. the filter action behind a
    generated URL. Subclasses receive their ports in ``__init__``.
    """

    @abstractmethod
    def execute(self, request: TRequest) -> TResponse:
        raise NotImplementedError

    def __call__(self, request: TRequest) -> TResponse:
        return self.execute(request)
