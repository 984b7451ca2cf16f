"""Tests for subprocess resource limits."""

import sys
from unittest.mock import patch

import pytest

from bindjar.toolchain.limits import apply_resource_limits, resource_limiter


class TestResourceLimiter:
    def test_none_when_unset(self):
        assert resource_limiter(0, 0) is None

    def test_none_for_negative_values(self):
        assert resource_limiter(-1, -1) is None

    @pytest.mark.skipif(sys.platform == "win32", reason="rlimits are POSIX only")
    def test_callable_when_memory_set(self):
        assert callable(resource_limiter(4 * 1024**3, 0))

    @pytest.mark.skipif(sys.platform == "win32", reason="rlimits are POSIX only")
    def test_callable_when_cpu_set(self):
        assert callable(resource_limiter(0, 120))


@pytest.mark.skipif(sys.platform == "win32", reason="rlimits are POSIX only")
class TestApplyResourceLimits:
    def test_only_positive_limits_applied(self):
        import resource

        with patch.object(resource, "setrlimit") as mock_setrlimit:
            apply_resource_limits(0, 30)

        mock_setrlimit.assert_called_once_with(
            resource.RLIMIT_CPU, (30, resource.RLIM_INFINITY)
        )

    def test_failure_is_logged(self, caplog):
        import resource

        with patch.object(resource, "setrlimit", side_effect=ValueError("too high")):
            apply_resource_limits(1024, 0)

        assert "Failed to apply resource limits" in caplog.text
