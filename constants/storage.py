TOKEN_KEY = "super_admin_token"
USER_KEY = "super_admin_user"
PHONE_KEY = "phone"
