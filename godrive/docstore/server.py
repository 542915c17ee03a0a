"""
JSON document store served over HTTP.

Each collection is a list of JSON documents kept in a single file. Every
document gets a physical ``_key`` on insert; clients address documents by
that key and find them by any field through the query endpoint. The logical
``id`` field must be unique within a collection.
"""

import json
import logging
import os
import threading
from uuid import uuid4

from flask import Flask, jsonify, request
from flask_cors import CORS

logger = logging.getLogger(__name__)

COLLECTIONS = ("users", "rides")
KEY_FIELD = "_key"


def empty_database() -> dict:
    return {name: [] for name in COLLECTIONS}


def ensure_db_file(db_file: str) -> None:
    """Create *db_file* with empty collections if it does not exist."""
    directory = os.path.dirname(db_file)
    if directory:
        os.makedirs(directory, exist_ok=True)
    if not os.path.exists(db_file):
        with open(db_file, 'w') as f:
            json.dump(empty_database(), f, indent=2)
        logger.info(f"Created empty database file: {db_file}")


def create_app(db_file: str) -> Flask:
    """Build the document store application backed by *db_file*."""
    ensure_db_file(db_file)
    app = Flask(__name__)
    CORS(app)
    # Serializes every read-modify-write of the file
    lock = threading.RLock()

    def read_db():
        """Read the database from the JSON file."""
        with open(db_file, 'r') as f:
            return json.load(f)

    def write_db(data):
        """Write data to the JSON file."""
        tmp_file = f"{db_file}.tmp"
        with open(tmp_file, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_file, db_file)

    def missing_collection(collection):
        return jsonify({"error": f"Collection '{collection}' not found"}), 404

    def find_index(items, key):
        for i, item in enumerate(items):
            if str(item.get(KEY_FIELD)) == str(key):
                return i
        return None

    @app.route('/')
    def get_root():
        """Get the entire database."""
        with lock:
            return jsonify(read_db())

    @app.route('/<collection>', methods=['GET', 'POST', 'DELETE'])
    def manage_collection(collection):
        """List, add to or clear a collection."""
        with lock:
            db = read_db()
            if collection not in db:
                return missing_collection(collection)

            if request.method == 'GET':
                return jsonify(db[collection])

            if request.method == 'DELETE':
                count = len(db[collection])
                db[collection] = []
                write_db(db)
                return jsonify({"deleted": count})

            new_item = request.get_json(silent=True)
            if not isinstance(new_item, dict):
                return jsonify({"error": "Request body must be a JSON object"}), 400
            item_id = new_item.get("id")
            if item_id is not None and any(i.get("id") == item_id for i in db[collection]):
                return jsonify({"error": f"Item with id '{item_id}' already exists in '{collection}'"}), 409
            new_item[KEY_FIELD] = uuid4().hex
            db[collection].append(new_item)
            write_db(db)
            return jsonify(new_item), 201

    @app.route('/<collection>/query', methods=['GET'])
    def query_collection(collection):
        """Query items in a collection based on parameters."""
        with lock:
            db = read_db()
        if collection not in db:
            return missing_collection(collection)

        params = request.args
        filtered_items = []
        for item in db[collection]:
            match = True
            for key, value in params.items():
                if key not in item or item[key] is None or str(item[key]) != value:
                    match = False
                    break
            if match:
                filtered_items.append(item)

        return jsonify(filtered_items)

    @app.route('/<collection>/<key>', methods=['GET', 'PUT', 'DELETE'])
    def manage_item(collection, key):
        """Get, replace or delete the document stored under *key*."""
        with lock:
            db = read_db()
            if collection not in db:
                return missing_collection(collection)

            item_index = find_index(db[collection], key)
            if item_index is None:
                return jsonify({"error": f"Item with key '{key}' not found in '{collection}'"}), 404

            if request.method == 'GET':
                return jsonify(db[collection][item_index])

            if request.method == 'PUT':
                updated_item = request.get_json(silent=True)
                if not isinstance(updated_item, dict):
                    return jsonify({"error": "Request body must be a JSON object"}), 400
                updated_item[KEY_FIELD] = db[collection][item_index][KEY_FIELD]
                db[collection][item_index] = updated_item
                write_db(db)
                return jsonify(updated_item)

            deleted_item = db[collection].pop(item_index)
            write_db(db)
            return jsonify(deleted_item)

    return app
