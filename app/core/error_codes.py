class ErrorCode:
    # auth
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"
    INVALID_USER = "INVALID_USER"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    ADMIN_REQUIRED = "ADMIN_REQUIRED"

    # users
    USER_NOT_FOUND = "USER_NOT_FOUND"
    CREDENTIAL_NOT_FOUND = "CREDENTIAL_NOT_FOUND"
    CREDENTIAL_CONFLICT = "CREDENTIAL_CONFLICT"

    # courses / training
    COURSE_NOT_FOUND = "COURSE_NOT_FOUND"
    COURSE_INACTIVE = "COURSE_INACTIVE"
    COURSE_INVALID = "COURSE_INVALID"
    COURSE_SAVE_FAILED = "COURSE_SAVE_FAILED"
    PROGRESS_SAVE_FAILED = "PROGRESS_SAVE_FAILED"
    COURSE_ALREADY_COMPLETED = "COURSE_ALREADY_COMPLETED"
    INVALID_ANSWER = "INVALID_ANSWER"

    # jobs
    JOB_NOT_FOUND = "JOB_NOT_FOUND"
    JOB_NOT_OPEN = "JOB_NOT_OPEN"
    JOB_INVALID = "JOB_INVALID"
    APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
    ALREADY_APPLIED = "ALREADY_APPLIED"
