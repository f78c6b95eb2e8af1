"""Services: roster assembly, batch orchestration, progress and SUMMARY output."""
