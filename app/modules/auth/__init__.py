# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User registration (auth.users table)
# - Password sign-in and OAuth (google, kakao) code exchange
# - JWT token generation and validation

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.sign_in_with_oauth() - Build the provider consent URL
- auth.exchange_code_for_session() - Turn the OAuth callback code into a session
- auth.get_user() - Get current user from JWT token
- auth.admin.sign_out(jwt) - Revoke the caller's session

The application-level record for each auth user lives in the profiles table
(see app/modules/profiles/__init__.py). It is created on first callback or on
sign-up, keyed by the auth user id.
"""
