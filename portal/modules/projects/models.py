# Supabase tables: projects, project_members, project_member_permissions, user_roles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: uuid (primary key)
- account_id: uuid (not null) - owning team account
- name: text (not null)
- description: text (nullable)
- app_url: text (nullable) - external application the token handoff redirects to
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

project_members:
- project_id: uuid (foreign key to projects.id, not null)
- user_id: uuid (foreign key to auth.users.id, not null)
- role: text (not null) - owner | admin | member
- created_at: timestamp (default: now())
- unique constraint on (project_id, user_id)

project_member_permissions:
- project_id: uuid (not null)
- user_id: uuid (not null)
- permission: public.feature_permission (not null)
- unique constraint on (project_id, user_id, permission)

user_roles:
- user_id: uuid (primary key, references auth.users.id)
- is_super_admin: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

RPC functions (security definer):
- get_user_permissions(target_user_id, target_project_id) -> feature_permission[]
- has_permission(target_user_id, target_project_id, target_permission) -> boolean
- grant_permission(target_user_id, target_project_id, target_permission) -> boolean
- revoke_all_permissions(target_user_id, target_project_id) -> void
"""
