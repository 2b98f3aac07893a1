from django.db import models


class Fund(models.Model):
    """A monetary contribution recorded after payment succeeds"""
    name = models.CharField(max_length=150, blank=True)
    email = models.EmailField(db_index=True)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    transaction_id = models.CharField(max_length=100, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.amount} from {self.email}"
