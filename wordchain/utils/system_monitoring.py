#!/usr/bin/env python3
"""
System Monitoring Module

Resource snapshots (memory, CPU, threads) around long-running operations such
as training a chain on a large corpus.
"""

import os
import time
import threading
import psutil
from datetime import datetime


class ResourceMonitor:
    """
    Takes psutil snapshots of the current process and logs them with the
    duration of the operation being monitored.
    """

    def __init__(self, logger):
        """
        Args:
            logger: Logger instance for recording resource metrics
        """
        self.logger = logger
        self.current_operation = None
        self.operation_start_time = None

    def get_resource_usage(self):
        """
        Get resource usage statistics for this process.

        Returns:
            dict: Memory, CPU and thread metrics
        """
        process = psutil.Process(os.getpid())
        memory_info = process.memory_info()
        system_memory = psutil.virtual_memory()

        return {
            "timestamp": datetime.now().isoformat(),
            "memory": {
                "current_mb": memory_info.rss / (1024 * 1024),
                "system_percent_used": system_memory.percent
            },
            "cpu": {
                "cores": psutil.cpu_count(logical=False),
                "logical_cores": psutil.cpu_count(logical=True)
            },
            "threads": threading.active_count(),
            "process_id": os.getpid()
        }

    def start(self, operation_name=None):
        """
        Mark the start of an operation and log the initial resource usage.

        Args:
            operation_name (str, optional): Name of the operation being monitored
        """
        self.current_operation = operation_name
        self.operation_start_time = time.time()

        self.logger.info(f"Resource monitoring started for operation: {operation_name}", extra={
            "metrics": self.get_resource_usage()
        })

    def stop(self, extra_metrics=None):
        """
        Log final resource usage and the elapsed time of the operation.

        Args:
            extra_metrics (dict, optional): Additional metrics to include in the log

        Returns:
            float or None: Seconds since ``start``, or None if never started
        """
        if self.operation_start_time is None:
            return None

        duration = time.time() - self.operation_start_time
        metrics = {
            "system_resources": self.get_resource_usage(),
            "operation": self.current_operation,
            "duration": duration
        }
        if extra_metrics:
            metrics.update(extra_metrics)

        self.logger.info("Resource monitoring stopped", extra={"metrics": metrics})

        self.current_operation = None
        self.operation_start_time = None
        return duration
