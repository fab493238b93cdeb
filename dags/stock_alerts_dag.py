"""Stock Alerts DAG.

stock_alerts_check: every 15 minutes, 09:00-16:45 New York time, Mon-Fri.
Calls the alerts job service (http_conn_id="alerts_job").
"""

from datetime import timedelta

import pendulum
from airflow import DAG
from airflow.providers.http.operators.http import HttpOperator
from airflow_utils import get_default_args

local_tz = pendulum.timezone("America/New_York")

with DAG(
    dag_id="stock_alerts_check",
    default_args=get_default_args(retries=1, retry_delay=timedelta(minutes=2)),
    description="Evaluate active price alerts and email triggered ones",
    schedule="0,15,30,45 9-16 * * 1-5",
    start_date=pendulum.datetime(2026, 1, 1, tz=local_tz),
    catchup=False,
    max_active_runs=1,
    tags=["alerts", "intraday"],
) as dag:
    check_stock_alerts = HttpOperator(
        task_id="check_stock_alerts",
        http_conn_id="alerts_job",
        endpoint="/jobs/check-stock-alerts",
        method="POST",
        headers={"Content-Type": "application/json"},
        response_check=lambda resp: resp.status_code == 200,
        execution_timeout=timedelta(minutes=10),
    )
