"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Status codes and their conventional messages, as produced by the
# ServerMessage factories. The status_code field itself is an open string.

CODE200 = "200"
OK_STATUS = "OK"

CODE400 = "400"
BAD_REQUEST = "Bad Request"

CODE500 = "500"
SERVER_ERROR = "Internal Server Error"

# Key names used in the encoded documents.

KIND = "kind"
CLIENT = "client"
SERVER = "server"

MESSAGE_TYPE = "messageType"
TARGET = "target"
TUPLE = "tuple"
TEMPLATE = "template"
BLOCKING = "blocking"
ALL = "all"
CLIENT_SESSION = "clientSession"

STATUS = "status"
STATUS_CODE = "statusCode"
STATUS_MESSAGE = "statusMessage"
TUPLES = "tuples"

# Keys used inside an encoded Tuple or Template.

FIELD_TYPE = "type"
FIELD_VALUE = "value"
ACTUAL = "actual"
FORMAL = "formal"
