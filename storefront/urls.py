from django.urls import path
from . import views

urlpatterns = [
    path('', views.home, name='home'),
    path('cart/', views.cart_view, name='cart'),
    path('cart/add/<str:product_id>/', views.add_to_cart, name='add_to_cart'),
    path('cart/remove/', views.remove_from_cart, name='remove_from_cart'),
    path('update-cart-item/', views.update_cart_item, name='update_cart_item'),
    path('checkout/', views.checkout, name='checkout'),
    path('orders/', views.my_orders, name='my_orders'),
    path('login/', views.login_view, name='login'),
    path('logout/', views.logout_view, name='logout'),

    # Admin panel
    path('admin-panel/', views.admin_panel, name='admin_panel'),
    path('admin-panel/products/', views.admin_product_submit, name='admin_product_submit'),
    path('admin-panel/products/cancel/', views.admin_product_cancel, name='admin_product_cancel'),
    path('admin-panel/products/<str:product_id>/edit/', views.admin_product_edit, name='admin_product_edit'),
    path('admin-panel/products/<str:product_id>/delete/', views.admin_product_delete, name='admin_product_delete'),
    path('admin-panel/orders/<str:order_id>/toggle/', views.admin_order_toggle, name='admin_order_toggle'),
]
