import hmac

from flask import current_app
from flask.views import MethodView
from flask_smorest import Blueprint, abort

from stockapp.config import setup_logger
from stockapp.exceptions import StoreError
from stockapp.schemas import UserSchema, UserFormSchema, SuccessSchema
from stockapp.services import UserService, InvalidUserKind
from stockapp.utils.auth_utils import require_basic_auth, AUTH_FAILURE, INTERNAL_SERVER_ERROR

logger = setup_logger(name="UserRoutes")

blp = Blueprint("Users", __name__, description="User accounts")

SUCCESS = {"success": "true"}
RESOURCE_DOESNT_EXIST_ERROR = "The specified resource doesn't exist"


def get_user_service():
    return UserService(log_rounds=current_app.config.get("BCRYPT_LOG_ROUNDS"))


@blp.route("/user/<string:username>")
class User(MethodView):
    @blp.doc(tags=["Users"])
    @blp.response(200, UserSchema)
    def get(self, username):
        """Get a user; Basic credentials must belong to the same user"""
        user_service = get_user_service()
        require_basic_auth(username, user_service)
        try:
            user = user_service.load_by_username(username)
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        if user is None:
            abort(404, message=RESOURCE_DOESNT_EXIST_ERROR)
        return user


@blp.route("/user")
class UserForm(MethodView):
    @blp.doc(tags=["Users"])
    @blp.arguments(UserFormSchema, location="form")
    @blp.response(200, SuccessSchema)
    def post(self, form):
        """Create (create=1), delete (delete=1) or change the password of a user"""
        user_service = get_user_service()
        username = form["username"]
        password = form.get("password")

        if form["create"] == 1 and form["delete"] == 1:
            abort(400, message="Only one of create and delete may be set")

        if form["create"] == 1:
            required_secret = current_app.config.get("USER_CREATE_SECRET")
            if required_secret and not hmac.compare_digest(form.get("secret") or "", required_secret):
                abort(401, message=AUTH_FAILURE)
            if password is None:
                abort(400, message="password is required")

            result = user_service.create_user(username, password)
            if result.error is not None:
                status = 409 if result.error.kind == InvalidUserKind.USERNAME_TAKEN else 400
                abort(status, message=result.error.message)
            if not result.ok:
                abort(500, message=INTERNAL_SERVER_ERROR)
            return SUCCESS

        require_basic_auth(username, user_service)

        if form["delete"] == 1:
            if not user_service.delete_user(username):
                abort(500, message=INTERNAL_SERVER_ERROR)
            return SUCCESS

        if not user_service.validate_password(password):
            abort(400, message="Invalid password")
        if not user_service.update_password(username, password):
            abort(500, message=INTERNAL_SERVER_ERROR)
        return SUCCESS
