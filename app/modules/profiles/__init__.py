# Supabase table: profiles
# This package documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id) - copied from the auth user, never generated
- email: text (not null)
- name: text (not null)
- role: text (not null) - 'brand' | 'influencer'
- avatar_url: text (nullable)
- bio: text (nullable)
- website: text (nullable)
- social_links: jsonb (default: '{}')
- verified: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

The primary key on id is what makes bootstrap creation idempotent: rows are
written with INSERT ... ON CONFLICT (id) DO NOTHING.
"""
