# Supabase Auth
# This module uses Supabase's built-in authentication system.
# No custom tables are required for identity; Supabase Auth owns auth.users,
# sessions and JWT validation for the portal's own access tokens.

"""
Fields read from auth.users:
- id: uuid - becomes `sub` / `userId` of project tokens
- email: text
- user_metadata: jsonb - name / full_name for display
- app_metadata: jsonb - server-controlled; app_metadata.role == "super-admin"
  marks a global super admin (legacy source, see user_roles for the other)

Project tokens minted by this module are NOT Supabase tokens. They are HS256
JWTs signed with PROJECT_TOKEN_SECRET, live 30 seconds, and are never stored.
"""
