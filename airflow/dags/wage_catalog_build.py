"""
Wage Catalog Build DAG

This DAG rebuilds the occupation wage catalog from the county spreadsheets:
1. Normalizes every {countykey}_ow.xls file into canonical wage records
2. Aggregates the records into the statewide occupation catalog

The source data is published once a year, so the DAG has no schedule and is
triggered manually after a new data drop lands in WAGE_DATA_DIR.
"""
from datetime import datetime, timedelta

from airflow import DAG
from airflow.operators.empty import EmptyOperator
from airflow.operators.python import PythonOperator
import pendulum


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

TZ = pendulum.timezone("America/New_York")

PROJECT_ROOT = '/opt/airflow'

default_args = {
    "owner": "wage-catalog",
    "depends_on_past": False,
    "email_on_failure": False,
    "email_on_retry": False,
    "retries": 1,
    "retry_delay": timedelta(minutes=5),
}


# -----------------------------------------------------------------------------
# Task Callable Functions
# -----------------------------------------------------------------------------

def _ensure_project_on_path():
    import sys

    if PROJECT_ROOT not in sys.path:
        sys.path.insert(0, PROJECT_ROOT)


def normalize_wage_files(**context):
    """
    Normalize the county wage spreadsheets.

    Fails the task when the data directory is missing or empty; a single
    unreadable county file only shows up in the returned stats.
    """
    _ensure_project_on_path()

    from wage_services.common.config_loader import load_catalog_config
    from wage_services.normalizer.main import run_normalizer
    from wage_services.normalizer.wage_reader import discover_county_files
    from wage_services.publisher.exporter import export_wage_records

    build = load_catalog_config().apply_env_overrides().build

    files = discover_county_files(build.data_dir)
    records, stats = run_normalizer(files, build.data_date, header_row=build.header_row)
    export_wage_records(records, build.output_dir, build.wage_records_file)

    return stats


def aggregate_catalog(**context):
    """Aggregate the wage records into occupations.json."""
    _ensure_project_on_path()

    from wage_services.aggregator.main import run_aggregator
    from wage_services.common.config_loader import load_catalog_config
    from wage_services.publisher.exporter import export_occupations, load_wage_records

    build = load_catalog_config().apply_env_overrides().build

    records = load_wage_records(build.wage_records_path)
    occupations = run_aggregator(records, build.label_strategy)
    export_occupations(occupations, build.output_dir, build.occupations_file)

    return {"occupations": len(occupations), "records": len(records)}


# -----------------------------------------------------------------------------
# DAG Definition
# -----------------------------------------------------------------------------

with DAG(
    dag_id="wage_catalog_build",
    default_args=default_args,
    description="Rebuild the occupation wage catalog from county spreadsheets",
    schedule=None,  # Triggered manually after a data drop
    start_date=datetime(2025, 1, 1, tzinfo=TZ),
    catchup=False,
    max_active_runs=1,
    tags=["wages", "catalog", "batch"],
) as dag:

    start = EmptyOperator(task_id="start")

    normalize = PythonOperator(
        task_id="normalize",
        python_callable=normalize_wage_files,
        doc_md="""
        **Normalize county wage files**

        - Reads every {countykey}_ow.xls in WAGE_DATA_DIR
        - Maps sentinel cells to null, normalizes education/area codes
        - Writes wage-records.json
        """
    )

    aggregate = PythonOperator(
        task_id="aggregate",
        python_callable=aggregate_catalog,
        doc_md="""
        **Aggregate occupation catalog**

        - Groups wage records by SOC code
        - Computes statewide and per-county wage ranges
        - Writes occupations.json sorted by SOC code
        """
    )

    end = EmptyOperator(task_id="end")

    start >> normalize >> aggregate >> end
