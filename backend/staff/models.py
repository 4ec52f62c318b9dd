from django.db import models
from django.utils.translation import gettext_lazy as _


class Staff(models.Model):
    """
    A member of the floor staff (server, bartender, manager).

    Staff rows are owned by the staff management screens; restaurant
    operations only read them to validate actors and targets and to snapshot
    display names onto requests and audit rows.
    """

    id = models.AutoField(primary_key=True)
    first_name = models.CharField(_("first name"), max_length=100)
    last_name = models.CharField(_("last name"), max_length=100, blank=True)
    email = models.EmailField(_("email address"), blank=True)
    phone = models.CharField(_("phone"), max_length=30, blank=True)
    is_active = models.BooleanField(
        _("active"),
        default=True,
        db_index=True,
        help_text=_("Inactive staff cannot receive orders."),
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Staff Member")
        verbose_name_plural = _("Staff")
        ordering = ["first_name", "last_name"]

    def __str__(self):
        return self.full_name

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
