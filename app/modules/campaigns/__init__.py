# Supabase tables: campaigns, campaign_applications
# This package documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

campaigns:
- id: uuid (primary key)
- brand_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- description: text (nullable)
- budget: numeric (nullable)
- requirements: text (nullable)
- deliverables: text[] (default: '{}')
- start_date: timestamp (nullable)
- end_date: timestamp (nullable)
- status: text (default: 'draft') - draft | active | paused | completed | cancelled
- tags: text[] (default: '{}')
- target_audience: jsonb (default: '{}')
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

campaign_applications:
- id: uuid (primary key)
- campaign_id: uuid (foreign key to campaigns.id, not null)
- influencer_id: uuid (foreign key to profiles.id, not null)
- status: text (default: 'pending') - pending | approved | rejected | completed
- proposal: text (nullable)
- proposed_rate: numeric (nullable)
- feedback: text (nullable)
- applied_at: timestamp (default: now())
- reviewed_at: timestamp (nullable)
"""
