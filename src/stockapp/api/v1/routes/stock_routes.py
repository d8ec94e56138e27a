"""
Stock Routes

Quotes, index members, search, exchanges and indexes. Every request must
carry a Username header and Basic credentials for that user.
"""
from flask import request
from flask.views import MethodView
from flask_smorest import Blueprint, abort

from stockapp.config import MIN_SEARCH_KEY_SIZE
from stockapp.exceptions import StoreError
from stockapp.schemas import (
    QuoteSchema,
    IndexMembersSchema,
    IndexListSchema,
    SearchQuerySchema,
    SearchResultSchema,
    ExchangeListSchema,
    ExchangeQuerySchema,
    IndexQuerySchema,
)
from stockapp.services import QuoteService
from stockapp.utils.auth_utils import require_basic_auth, USERNAME_HEADER, INTERNAL_SERVER_ERROR
from stockapp.utils.parse_utils import parse_id_list
from .user_routes import get_user_service, RESOURCE_DOESNT_EXIST_ERROR

blp = Blueprint("Stocks", __name__, description="Quotes, indexes and exchanges")
quote_service = QuoteService()


def authenticate():
    require_basic_auth(request.headers.get(USERNAME_HEADER), get_user_service())


@blp.route("/stock/<string:exchange>/<string:symbol>")
class StockQuote(MethodView):
    @blp.doc(tags=["Stocks"])
    @blp.response(200, QuoteSchema)
    def get(self, exchange, symbol):
        """Latest quote of a single stock or index"""
        authenticate()
        try:
            quote = quote_service.get_quote(exchange, symbol)
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        if quote is None:
            abort(404, message=RESOURCE_DOESNT_EXIST_ERROR)
        return quote


@blp.route("/index/<string:exchange>/<string:symbol>/members")
class IndexMembers(MethodView):
    @blp.doc(tags=["Stocks"])
    @blp.response(200, IndexMembersSchema)
    def get(self, exchange, symbol):
        """Quote of an index and of all its constituents"""
        authenticate()
        try:
            items = quote_service.get_index_members(exchange, symbol)
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        if items is None:
            abort(404, message="Requested index not found on the exchange.")
        return {"items": items}


@blp.route("/search")
class Search(MethodView):
    @blp.doc(tags=["Stocks"])
    @blp.arguments(SearchQuerySchema, location="query")
    @blp.response(200, SearchResultSchema)
    def get(self, args):
        """Stocks and indexes whose symbol contains substr"""
        authenticate()
        substr = args.get("substr") or ""
        if len(substr) < MIN_SEARCH_KEY_SIZE:
            return {"results": []}
        try:
            results = quote_service.search_by_substring(substr.upper())
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        return {"results": results}


@blp.route("/indexes")
class Indexes(MethodView):
    @blp.doc(tags=["Stocks"])
    @blp.arguments(IndexQuerySchema, location="query")
    @blp.response(200, IndexListSchema)
    def get(self, args):
        """Quotes of all indexes on an exchange"""
        authenticate()
        try:
            indexes = quote_service.list_indexes(args["exid"])
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        return {"indexes": indexes}


@blp.route("/exchanges")
class Exchanges(MethodView):
    @blp.doc(tags=["Stocks"])
    @blp.arguments(ExchangeQuerySchema, location="query")
    @blp.response(200, ExchangeListSchema)
    def get(self, args):
        """Exchanges by comma separated ids"""
        authenticate()
        exchange_ids = parse_id_list(args["exids"])
        if exchange_ids is None:
            abort(400, message="Bad request")
        try:
            exchanges = quote_service.list_exchanges(exchange_ids)
        except StoreError:
            abort(500, message=INTERNAL_SERVER_ERROR)
        return {"exchanges": exchanges}
