class GlobalMessages:
    # Request guard messages
    ORIGIN_REQUIRED = "Origin header required"
    ORIGIN_NOT_ALLOWED = "Origin not allowed: {origin}"
    BODY_TOO_LARGE = "Request body too large"
    BAD_REQUEST = "Bad request"

    # Contact messages
    CONTACT_SUBJECT = "Contact: {name}"
    CONTACT_SUBJECT_WITH_SERVICE = "Contact: {name} [{service}]"
