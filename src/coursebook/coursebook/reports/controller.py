from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.web import current_actor, json_view
from ..container import Container

_CSV_FIELDS = ["idn", "username", "full_name", "attendance", "grade"]


def register(app: Flask, container: Container) -> None:
    def _write_report_csv(*, data, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=_CSV_FIELDS)
        writer.writeheader()
        for row in data.rows:
            writer.writerow(row)

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/courses/<int:course_id>/report", methods=["GET"], endpoint="course_report")
    @json_view("Error building report.")
    def course_report(course_id: int):
        actor = current_actor(container.user_service)
        now = now_local()
        data = container.report_service.build_course_report(actor, course_id, now=now)
        if request.args.get("format") == "csv":
            return _write_report_csv(data=data, filename=f"course_{course_id}_{now:%Y%m%d}.csv")
        return jsonify({"rows": data.rows, "summary": data.summary})
