"""Pure scheduling building blocks: schedule, capacity, slots, overlap."""
