from rest_framework import permissions

from .models import Role, User

FORBIDDEN = 'Forbidden Access'


class SelfMatch(permissions.BasePermission):
    """The verified subject must be the email the request names.

    Views declare where that email lives with ``self_match_source``
    (``path``, ``query`` or ``body``) and ``self_match_field``.
    """
    message = FORBIDDEN

    def has_permission(self, request, view):
        source = getattr(view, 'self_match_source', 'path')
        field = getattr(view, 'self_match_field', 'email')

        if source == 'path':
            target = view.kwargs.get(field)
        elif source == 'query':
            target = request.query_params.get(field)
        elif source == 'body':
            target = request.data.get(field) if hasattr(request.data, 'get') else None
        else:
            raise ValueError(f"Unknown self-match source: {source}")

        return target is not None and target == request.user.email


class RoleMatch(permissions.BasePermission):
    """The subject's stored role must be one of ``allowed_roles``.

    Reads the user record on every call; roles are never cached across requests.
    """
    message = FORBIDDEN
    allowed_roles = frozenset()

    def has_permission(self, request, view):
        return self.subject_has_role(request)

    def subject_has_role(self, request):
        user = User.objects.filter(email=request.user.email).only('role').first()
        return user is not None and user.has_role(*self.allowed_roles)


class OwnerOrRole(RoleMatch):
    """Object-level: the subject owns the record, or holds an allowed role."""
    owner_fields = ('requester_email',)

    def has_permission(self, request, view):
        return True

    def has_object_permission(self, request, view, obj):
        email = request.user.email
        if any(getattr(obj, name, None) == email for name in self.owner_fields):
            return True
        return self.subject_has_role(request)


def _check_roles(roles):
    for role in roles:
        if not isinstance(role, Role):
            raise TypeError(f"Expected a Role, got {role!r}")
    return frozenset(roles)


def role_required(*roles):
    allowed = _check_roles(roles)
    name = 'RoleMatch_' + '_'.join(sorted(allowed))
    return type(name, (RoleMatch,), {'allowed_roles': allowed})


def owner_or_role(*roles, owner_fields=('requester_email',)):
    allowed = _check_roles(roles)
    name = 'OwnerOrRole_' + '_'.join(sorted(allowed))
    return type(name, (OwnerOrRole,), {'allowed_roles': allowed, 'owner_fields': tuple(owner_fields)})
