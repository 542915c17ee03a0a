"""REST endpoints for the GoDrive application."""

import logging

from flask import Blueprint, current_app, jsonify, render_template, request

from godrive.errors import InvalidArgumentError
from godrive.models import RideStatus
from godrive.api.parsing import (
    boolean, entity_id, number, parse_contact, parse_payment, parse_rating,
    parse_ride_location, parse_vehicle, require_fields,
)

logger = logging.getLogger(__name__)

api = Blueprint("api", __name__)


def _rides():
    return current_app.extensions["godrive"]["rides"]


def _queries():
    return current_app.extensions["godrive"]["queries"]


def _body():
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise InvalidArgumentError("body", "must be a JSON object")
    return payload


def _location(payload):
    require_fields(payload, ["latitude", "longitude"])
    return number(payload, "latitude"), number(payload, "longitude")


@api.route("/")
def dashboard():
    """Render the browser dashboard."""
    queries = _queries()
    return render_template(
        "dashboard.html",
        stats=queries.get_system_statistics(),
        users=queries.list_all_users(),
        rides=queries.list_all_rides(),
    )


# Statistics and users

@api.route("/api/statistics")
def statistics():
    return jsonify(_queries().get_system_statistics())


@api.route("/api/users", methods=["GET"])
def list_users():
    name = request.args.get("q")
    if name:
        return jsonify(_queries().search_users(name))
    return jsonify(_queries().list_all_users())


@api.route("/api/users", methods=["DELETE"])
def delete_all_users():
    count = _rides().delete_all_users()
    return jsonify({"message": "All users deleted", "count": count, "success": True})


@api.route("/api/users/<user_id>", methods=["GET"])
def get_user(user_id):
    user = _queries().get_user_info(user_id)
    if user is None:
        return jsonify({"error": "User not found"}), 404
    return jsonify(user)


@api.route("/api/users/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    if not _rides().delete_user(user_id):
        return jsonify({"error": "User not found", "success": False}), 404
    return jsonify({"message": "User deleted", "id": user_id, "success": True})


@api.route("/api/users/<user_id>/active", methods=["PUT"])
def set_user_active(user_id):
    payload = _body()
    user = _rides().set_user_active(user_id, boolean(payload, "active"))
    return jsonify({"message": "User updated", "user": user})


# Drivers

@api.route("/api/drivers", methods=["POST"])
def create_driver():
    payload = _body()
    require_fields(payload, ["firstName", "lastName", "email", "driverId", "licenseNumber", "vehicle"])
    driver = _rides().create_driver(
        entity_id(payload),
        payload["firstName"],
        payload["lastName"],
        payload["email"],
        parse_contact(payload),
        driver_id=payload["driverId"],
        license_number=payload["licenseNumber"],
        vehicle=parse_vehicle(payload["vehicle"]),
    )
    return jsonify({"message": "Driver created", "driver": driver}), 201


@api.route("/api/drivers", methods=["GET"])
def list_drivers():
    return jsonify(_queries().list_all_drivers())


@api.route("/api/drivers/available")
def list_available_drivers():
    return jsonify(_queries().list_available_drivers())


@api.route("/api/drivers/<driver_id>/location", methods=["PUT"])
def update_driver_location(driver_id):
    latitude, longitude = _location(_body())
    _rides().update_driver_location(driver_id, latitude, longitude)
    return jsonify({"message": "Location updated",
                    "location": {"latitude": latitude, "longitude": longitude}})


@api.route("/api/drivers/<driver_id>/availability", methods=["PUT"])
def set_driver_availability(driver_id):
    available = boolean(_body(), "available")
    _rides().set_driver_availability(driver_id, available)
    return jsonify({"message": "Availability updated", "available": available})


@api.route("/api/drivers/<driver_id>/ratings", methods=["POST"])
def rate_driver(driver_id):
    rating = parse_rating(_body())
    driver = _rides().rate_driver(driver_id, rating)
    return jsonify({"message": "Rating added", "rating": rating.to_record(),
                    "averageRating": driver["averageRating"]})


@api.route("/api/drivers/<driver_id>/rides")
def list_driver_rides(driver_id):
    return jsonify(_queries().list_rides_by_driver(driver_id))


# Passengers

@api.route("/api/passengers", methods=["POST"])
def create_passenger():
    payload = _body()
    require_fields(payload, ["firstName", "lastName", "email", "passengerId"])
    passenger = _rides().create_passenger(
        entity_id(payload),
        payload["firstName"],
        payload["lastName"],
        payload["email"],
        parse_contact(payload),
        passenger_id=payload["passengerId"],
    )
    return jsonify({"message": "Passenger created", "passenger": passenger}), 201


@api.route("/api/passengers", methods=["GET"])
def list_passengers():
    return jsonify(_queries().list_all_passengers())


@api.route("/api/passengers/<passenger_id>/add-funds", methods=["POST"])
def add_funds(passenger_id):
    payload = _body()
    require_fields(payload, ["amount"])
    amount = number(payload, "amount")
    passenger = _rides().add_funds_to_passenger(passenger_id, amount)
    return jsonify({"message": "Funds added", "amount": amount,
                    "walletBalance": passenger["walletBalance"]})


@api.route("/api/passengers/<passenger_id>/favorite-drivers", methods=["POST"])
def add_favorite_driver(passenger_id):
    payload = _body()
    require_fields(payload, ["driverId"])
    _rides().add_favorite_driver(passenger_id, payload["driverId"])
    return jsonify({"message": "Driver added to favorites", "driverId": payload["driverId"]})


@api.route("/api/passengers/<passenger_id>/favorite-drivers/<driver_id>", methods=["DELETE"])
def remove_favorite_driver(passenger_id, driver_id):
    _rides().remove_favorite_driver(passenger_id, driver_id)
    return jsonify({"message": "Driver removed from favorites", "driverId": driver_id})


@api.route("/api/passengers/<passenger_id>/rides")
def list_passenger_rides(passenger_id):
    return jsonify(_queries().list_rides_by_passenger(passenger_id))


@api.route("/api/passengers/<passenger_id>/location", methods=["PUT"])
def update_passenger_location(passenger_id):
    latitude, longitude = _location(_body())
    _rides().update_passenger_location(passenger_id, latitude, longitude)
    return jsonify({"message": "Location updated",
                    "location": {"latitude": latitude, "longitude": longitude}})


# Administrators

@api.route("/api/administrators", methods=["POST"])
def create_administrator():
    payload = _body()
    require_fields(payload, ["firstName", "lastName", "email", "adminId", "department"])
    admin = _rides().create_administrator(
        entity_id(payload),
        payload["firstName"],
        payload["lastName"],
        payload["email"],
        parse_contact(payload),
        admin_id=payload["adminId"],
        department=payload["department"],
        access_level=payload.get("accessLevel", 2),
    )
    return jsonify({"message": "Administrator created", "admin": admin}), 201


# Rides

@api.route("/api/rides", methods=["POST"])
def create_ride():
    payload = _body()
    require_fields(payload, ["passengerId", "origin", "destination", "requestedPrice"])
    ride = _rides().create_ride(
        entity_id(payload),
        payload["passengerId"],
        parse_ride_location(payload["origin"], "origin"),
        parse_ride_location(payload["destination"], "destination"),
        number(payload, "requestedPrice"),
        distance=number(payload, "distance", 0),
        estimated_duration=number(payload, "estimatedDuration", 0),
    )
    return jsonify({"message": "Ride created", "ride": ride}), 201


@api.route("/api/rides", methods=["GET"])
def list_rides():
    status = request.args.get("status")
    if status:
        try:
            status = RideStatus(status.upper())
        except ValueError:
            raise InvalidArgumentError("status", f"unknown ride status {status!r}")
        return jsonify(_queries().list_rides_by_status(status))
    return jsonify(_queries().list_all_rides())


@api.route("/api/rides/available")
def list_available_rides():
    return jsonify(_queries().list_available_rides())


@api.route("/api/rides/<ride_id>")
def get_ride(ride_id):
    ride = _queries().get_ride_info(ride_id)
    if ride is None:
        return jsonify({"error": "Ride not found"}), 404
    return jsonify(ride)


@api.route("/api/rides/<ride_id>/accept", methods=["POST"])
def accept_ride(ride_id):
    payload = _body()
    require_fields(payload, ["driverId"])
    ride = _rides().accept_ride(ride_id, payload["driverId"])
    return jsonify({"message": "Ride accepted", "ride": ride})


@api.route("/api/rides/<ride_id>/start", methods=["POST"])
def start_ride(ride_id):
    ride = _rides().start_ride(ride_id)
    return jsonify({"message": "Ride started", "ride": ride})


@api.route("/api/rides/<ride_id>/complete", methods=["POST"])
def complete_ride(ride_id):
    payload = _body()
    require_fields(payload, ["finalPrice", "payment"])
    ride = _rides().complete_ride(ride_id, number(payload, "finalPrice"),
                                  parse_payment(payload["payment"]))
    return jsonify({"message": "Ride completed", "ride": ride})


@api.route("/api/rides/<ride_id>/cancel", methods=["POST"])
def cancel_ride(ride_id):
    reason = _body().get("reason")
    ride = _rides().cancel_ride(ride_id, reason)
    return jsonify({"message": "Ride cancelled", "ride": ride,
                    "reason": reason or "Not specified"})
