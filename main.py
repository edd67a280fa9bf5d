# main.py
from flask import Flask, request, jsonify, render_template
import json
import logging

import config
from history import HistoryStore, JsonFileStore
from models import Dialect, QueryType
from workflow import SqlGeneratorWorkflow

LOG = logging.getLogger(__name__)

app = Flask(__name__)

workflow = SqlGeneratorWorkflow(HistoryStore(JsonFileStore(config.HISTORY_FILE)))


def render_home(form: dict, status=None):
    return render_template(
        "home.html",
        form=form,
        status=status,
        query_types=[q.value for q in QueryType],
        dialects=[d.value for d in Dialect],
        table_names=workflow.history.table_names(),
        suggestions=workflow.history.structure_suggestions(),
    )


def default_form() -> dict:
    return {
        "query_type": config.DEFAULT_QUERY_TYPE,
        "dialect": Dialect.parse(config.DEFAULT_DIALECT).value,
        "table_name": "",
        "structure": "",
        "rows": "",
    }


@app.route("/", methods=["GET"])
def home():
    form = default_form()
    # suggestion chips are plain links: /?structure=<full text>
    if request.args.get("structure"):
        form["structure"] = request.args["structure"]
    return render_home(form)


@app.route("/", methods=["POST"])
def home_generate():
    form = default_form()
    form.update({k: request.form.get(k, v) for k, v in form.items()})
    status = workflow.generate(form["query_type"], form["dialect"], form["table_name"],
                               form["structure"], form["rows"])
    code = 400 if status.is_error else 200
    return render_home(form, status), code


def as_text(value) -> str:
    # API callers may send structure/rows as real JSON instead of text
    if isinstance(value, (list, dict)):
        return json.dumps(value)
    return "" if value is None else str(value)


@app.route("/generate", methods=["POST"])
def generate():
    body = request.get_json(force=True, silent=True)
    if not isinstance(body, dict):
        LOG.debug("rejected /generate body: %r", body)
        return jsonify({"error": "JSON object body required"}), 400
    status = workflow.generate(
        body.get("query_type", config.DEFAULT_QUERY_TYPE),
        body.get("dialect", config.DEFAULT_DIALECT),
        as_text(body.get("table_name")),
        as_text(body.get("structure")),
        as_text(body.get("rows")),
    )
    if status.is_error:
        return jsonify({"error": status.message, "kind": status.error_kind.value}), 400
    return jsonify({"sql": status.sql})


@app.route("/history", methods=["GET"])
def history():
    return jsonify({
        "table_names": workflow.history.table_names(),
        "structures": [{"label": label, "value": value}
                       for label, value in workflow.history.structure_suggestions()],
    })


if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    print("Registered routes:")
    for r in sorted([rule.rule for rule in app.url_map.iter_rules()]):
        print(" ", r)
    app.run(host=config.HOST, port=config.PORT)
