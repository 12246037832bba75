from __future__ import annotations

from typing import Iterator

from apps.phone_auth.domain.auth_flow import AuthenticationStrategy


class AuthenticationStrategyRegistry:
    """Ordered, name-unique collection of strategies owned by the host."""

    def __init__(self, strategies: list[AuthenticationStrategy] | None = None):
        self._strategies: list[AuthenticationStrategy] = []
        for strategy in strategies or []:
            self.register(strategy)

    def register(self, strategy: AuthenticationStrategy) -> None:
        if any(existing.name == strategy.name for existing in self._strategies):
            raise ValueError(f"Authentication strategy '{strategy.name}' is already registered.")
        self._strategies.append(strategy)

    def get(self, name: str) -> AuthenticationStrategy:
        for strategy in self._strategies:
            if strategy.name == name:
                return strategy
        raise KeyError(name)

    def names(self) -> list[str]:
        return [strategy.name for strategy in self._strategies]

    def __iter__(self) -> Iterator[AuthenticationStrategy]:
        return iter(list(self._strategies))

    def __len__(self) -> int:
        return len(self._strategies)
