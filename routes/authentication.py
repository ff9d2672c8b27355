from flask import Blueprint, jsonify, current_app
from models.users import User
from classes.validators import validate_input, validate_role, USER_RULES
from utils.errors import InvalidInputError, UnauthorizedError
from utils.helpers import get_json_body
from utils.tokens import get_jwt_token
from utils.transaction import transaction

auth_bp = Blueprint('auth_bp', __name__)


# Register
@auth_bp.route('/register', methods=['POST'])
def register():
    data = get_json_body()
    validate_input(data, USER_RULES)

    role = data.get('role') or 'student'
    validate_role(role)

    if User.find_by_email(data['email']):
        raise InvalidInputError("User already exists")

    with transaction() as session:
        new_user = User(name=data['name'].strip(), email=data['email'], role=role)
        new_user.set_password(data['password'])
        session.add(new_user)

    current_app.logger.info(f"Registered user {new_user.id} ({role})")
    return jsonify({"message": "User registered successfully", "user": new_user.to_dict()}), 201


# Login
@auth_bp.route('/login', methods=['POST'])
def login():
    data = get_json_body()
    email = data.get("email")
    password = data.get("password")

    if not email or not password:
        raise InvalidInputError("Email and password are required")

    user = User.find_by_email(email)
    if not user or not user.check_password(password):
        raise UnauthorizedError("Invalid credentials")

    token = get_jwt_token({"user_id": user.id, "role": user.role})

    return jsonify({
        "message": "Login successful",
        "token": token,
        "user": user.to_dict(),
    }), 200
