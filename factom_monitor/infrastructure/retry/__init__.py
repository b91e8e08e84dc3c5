"""Retry delay policies."""

from .backoff import ConstantRetry, ExponentialBackoff, RetryPolicy, retry_policy_from_settings

__all__ = ["ConstantRetry", "ExponentialBackoff", "RetryPolicy", "retry_policy_from_settings"]
