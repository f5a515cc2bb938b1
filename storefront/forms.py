from django import forms

from .models import product_fields


class ProductForm(forms.Form):
    name = forms.CharField(label='Product Name', max_length=255, strip=False)
    price = forms.DecimalField(label='Price', widget=forms.NumberInput(attrs={'step': 'any'}))
    description = forms.CharField(label='Description', strip=False, widget=forms.Textarea(attrs={'rows': 4}))
    image = forms.CharField(label='Image URL', required=False, strip=False,
                            widget=forms.TextInput(attrs={'placeholder': 'https://example.com/image.jpg'}))
    category = forms.CharField(label='Category', strip=False)
    stock = forms.IntegerField(label='Stock')

    @classmethod
    def for_product(cls, product):
        return cls(initial={
            'name': product.name,
            'price': product.price,
            'description': product.description,
            'image': product.image,
            'category': product.category,
            'stock': product.stock,
        })

    def to_payload(self):
        return product_fields(**self.cleaned_data)


class LoginForm(forms.Form):
    email = forms.EmailField()
    password = forms.CharField(widget=forms.PasswordInput)
