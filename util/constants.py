# util/constants.py
class InternalURIs:
    ROOT = "/"
    HEALTHZ = "/healthz"
    API = "/api"
    USER = API + "/user"
    FS = API + "/fs"
    FS_WRITE = FS + "/write"
    FS_READ = FS + "/read"
    FS_MKDIR = FS + "/mkdir"
    FS_COPY = FS + "/copy"
    FS_MOVE = FS + "/move"
    FS_DELETE = FS + "/delete"
    FS_LIST = FS + "/list"
    FS_STAT = FS + "/stat"


ANONYMOUS_SCOPE = "anonymous"
