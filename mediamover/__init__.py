"""mediamover: inspect and migrate media buckets from Supabase Storage to Cloudflare R2."""
