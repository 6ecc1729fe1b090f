from __future__ import annotations

import argparse

from dune_provisioner import (
    DriftExpectation,
    MaterializedViewResource,
    QueryResource,
    load_provider,
    resolve_or_create_query,
    upsert_materialized_view,
    verify_materialized_view,
)


def main() -> None:
    parser = argparse.ArgumentParser(description="Reconcile one query and its materialized view")
    parser.add_argument("--name", default="result_daily_volume", help="Materialized view name")
    parser.add_argument("--query-id", default=None, help="Existing query id to reuse")
    parser.add_argument("--cron", default="0 */6 * * *", help="Refresh schedule")
    args = parser.parse_args()

    provider = load_provider()

    query = resolve_or_create_query(
        provider,
        QueryResource(
            name="Daily DEX volume",
            sql="select block_date, sum(amount_usd) from dex.trades group by 1",
            query_id=args.query_id,
        ),
    )
    print(f"query {query.id} ({query.mode.value})")

    view = upsert_materialized_view(
        provider,
        MaterializedViewResource(name=args.name, query_id=query.id, cron_expression=args.cron),
    )
    print(f"view {view.full_name} execution_id={view.execution_id}")

    report = verify_materialized_view(
        provider,
        DriftExpectation(name=view.full_name, query_id=query.id, cron_expression=args.cron),
    )
    print(f"verify: {report.status.value} - {report.message}")


if __name__ == "__main__":
    main()
