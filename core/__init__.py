from .endfield import (
    ATTENDANCE_URL,
    EndfieldAttendance,
    build_headers,
    manually_endfield_sign,
    perform_account_sign,
)
