from enum import Enum


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    NOT_AUTHORIZED = "not_authorized"
    NOT_AUTHENTICATED = "not_authenticated"
    UNAVAILABLE = "unavailable"
    INTERNAL_INCONSISTENCY = "internal_inconsistency"


class BorgaError(Exception):
    kind = ErrorKind.INTERNAL_INCONSISTENCY
    code = "BORGA_ERROR"
    default_message = "Unexpected error"

    def __init__(self, message: str = None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "code": self.code,
            "kind": self.kind.value,
        }


# ==================== Not found ====================

class UserNotFound(BorgaError):
    kind = ErrorKind.NOT_FOUND
    code = "USER_DOES_NOT_EXIST"
    default_message = "User does not exist"


class GroupNotFound(BorgaError):
    kind = ErrorKind.NOT_FOUND
    code = "GROUP_DOES_NOT_EXIST"
    default_message = "Group does not exist"


class GameNotFound(BorgaError):
    kind = ErrorKind.NOT_FOUND
    code = "GAME_DOES_NOT_EXIST"
    default_message = "Game does not exist"


class GameNotInGroup(BorgaError):
    kind = ErrorKind.NOT_FOUND
    code = "GROUP_DOES_NOT_HAVE_GAME"
    default_message = "Group does not have this game"


class NotAssociated(BorgaError):
    kind = ErrorKind.NOT_FOUND
    code = "USER_DOES_NOT_HAVE_THIS_GROUP"
    default_message = "User is not associated with this group"


# ==================== Invalid input ====================

class InvalidUsername(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_USERNAME"
    default_message = "Username must be a non-empty string"


class InvalidName(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_GROUP_NAME"
    default_message = "Group name must be a non-empty string"


class InvalidDescription(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_GROUP_DESCRIPTION"
    default_message = "Group description must be a non-empty string"


class InvalidGroupId(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_GROUP_ID"
    default_message = "Group id must be an integer"


class InvalidGame(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_GAME"
    default_message = "Game must have a non-empty id"


class InvalidQuery(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "INVALID_QUERY"
    default_message = "Query is not recognized"


class MissingParameter(BorgaError):
    kind = ErrorKind.INVALID_INPUT
    code = "MISSING_PARAM"
    default_message = "A required parameter is missing"


# ==================== Conflict ====================

class UserAlreadyExists(BorgaError):
    kind = ErrorKind.CONFLICT
    code = "USER_ALREADY_EXISTS"
    default_message = "User already exists"


class GameAlreadyInGroup(BorgaError):
    kind = ErrorKind.CONFLICT
    code = "GROUP_ALREADY_HAS_GAME"
    default_message = "Group already has this game"


class AlreadyAssociated(BorgaError):
    kind = ErrorKind.CONFLICT
    code = "USER_ALREADY_HAS_THIS_GROUP"
    default_message = "User is already associated with this group"


# ==================== Access ====================

class NotAuthorized(BorgaError):
    kind = ErrorKind.NOT_AUTHORIZED
    code = "NOT_AUTHORIZED"
    default_message = "Only the group owner can do this"


class NotAuthenticated(BorgaError):
    kind = ErrorKind.NOT_AUTHENTICATED
    code = "INVALID_TOKEN"
    default_message = "Missing or invalid bearer token"


# ==================== Availability ====================

class CatalogUnavailable(BorgaError):
    kind = ErrorKind.UNAVAILABLE
    code = "CATALOG_UNAVAILABLE"
    default_message = "Game catalog is unavailable"


class GateOverloaded(BorgaError):
    kind = ErrorKind.UNAVAILABLE
    code = "QUEUE_FULL"
    default_message = "Too many requests waiting for the game catalog"


# ==================== Bugs ====================

class InternalInconsistency(BorgaError):
    kind = ErrorKind.INTERNAL_INCONSISTENCY
    code = "INTERNAL_INCONSISTENCY"
    default_message = "Store invariant violated"
