"""WhatsApp front desk agent with human operator handoff."""
