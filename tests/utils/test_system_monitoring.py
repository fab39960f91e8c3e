import pytest
from unittest.mock import MagicMock, patch

from wordchain.utils.system_monitoring import ResourceMonitor


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing"""
    return MagicMock()


@pytest.fixture
def mock_psutil():
    with patch("wordchain.utils.system_monitoring.psutil") as psutil:
        psutil.Process.return_value.memory_info.return_value.rss = 64 * 1024 * 1024
        psutil.virtual_memory.return_value.percent = 42.0
        psutil.cpu_count.side_effect = lambda logical=True: 8 if logical else 4
        yield psutil


def test_get_resource_usage(mock_logger, mock_psutil):
    usage = ResourceMonitor(mock_logger).get_resource_usage()

    assert usage["memory"]["current_mb"] == pytest.approx(64.0)
    assert usage["memory"]["system_percent_used"] == 42.0
    assert usage["cpu"] == {"cores": 4, "logical_cores": 8}
    assert usage["threads"] >= 1


def test_start_and_stop_log_metrics(mock_logger, mock_psutil):
    monitor = ResourceMonitor(mock_logger)

    monitor.start("markov_training")
    assert monitor.current_operation == "markov_training"

    duration = monitor.stop(extra_metrics={"tokens": 12})
    assert duration >= 0

    metrics = mock_logger.info.call_args.kwargs["extra"]["metrics"]
    assert metrics["operation"] == "markov_training"
    assert metrics["tokens"] == 12
    assert "system_resources" in metrics
    assert monitor.current_operation is None


def test_stop_without_start(mock_logger, mock_psutil):
    assert ResourceMonitor(mock_logger).stop() is None
    mock_logger.info.assert_not_called()


def test_real_process_snapshot(mock_logger):
    usage = ResourceMonitor(mock_logger).get_resource_usage()
    assert usage["memory"]["current_mb"] > 0
