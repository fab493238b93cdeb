"""Shared Airflow helpers — failure webhook + common default_args."""

import logging
import os
from datetime import timedelta

import requests

logger = logging.getLogger(__name__)

DEFAULT_ARGS = {
    "owner": "seedling",
    "depends_on_past": False,
    "retries": 1,
    "retry_delay": timedelta(minutes=2),
    "on_failure_callback": None,  # set in get_default_args
}


def send_failure_alert(context: dict) -> None:
    """Post a failed task summary to AIRFLOW_FAILURE_WEBHOOK_URL (Slack-compatible)."""
    url = os.getenv("AIRFLOW_FAILURE_WEBHOOK_URL")
    if not url:
        logger.warning("AIRFLOW_FAILURE_WEBHOOK_URL not set, skipping failure alert")
        return

    dag_id = context["dag"].dag_id if context.get("dag") else "unknown"
    task_id = context["task_instance"].task_id if context.get("task_instance") else "unknown"
    logical_date = str(context.get("logical_date", ""))
    exception = str(context.get("exception", ""))[:500]

    message = f"[Airflow] {dag_id}.{task_id} failed\nDate: {logical_date}\nError: {exception}"

    try:
        requests.post(url, json={"text": message}, timeout=10)
    except requests.RequestException as e:
        logger.error("Failed to send failure alert: %s", e)


def get_default_args(**overrides) -> dict:
    """Common default_args with per-DAG overrides."""
    args = {**DEFAULT_ARGS, "on_failure_callback": send_failure_alert}
    args.update(overrides)
    return args
