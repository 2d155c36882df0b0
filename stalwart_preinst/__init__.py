"""Pre-install hook for the stalwart-jmap package.

Runs before the package payload is unpacked:
- Create the stalwart-jmap system account (no login shell, no home)
- Create /var/lib/stalwart-jmap and /etc/stalwart-jmap/{certs,private}
- Restrict the data directory to the account (mode 770)

Steps run in order and the first failure aborts the hook.
"""

__all__ = []
